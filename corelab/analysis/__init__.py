"""Calculation engines for concrete quality tests."""
from .core_calculations import CoreAnalyzer, CoreAnalysisConfig, CoreSampleResult, CoreBatchResult
from .pulloff_calculations import (PullOffAnalyzer, PullOffAnalysisConfig,
                                   PullOffSpecimenResult, PullOffBatchResult)
from .schmidt_calculations import (SchmidtAnalyzer, SchmidtAnalysisConfig,
                                   SchmidtElementResult, SchmidtBatchResult)
from .statistics import BatchStatistics, aggregate
from .tables import CorrectionTables, DEFAULT_TABLES
from .uncertainty import UncertaintyBudget, UncertaintyComponent

__all__ = ['CoreAnalyzer', 'CoreAnalysisConfig', 'CoreSampleResult', 'CoreBatchResult',
           'PullOffAnalyzer', 'PullOffAnalysisConfig',
           'PullOffSpecimenResult', 'PullOffBatchResult',
           'SchmidtAnalyzer', 'SchmidtAnalysisConfig',
           'SchmidtElementResult', 'SchmidtBatchResult',
           'BatchStatistics', 'aggregate',
           'CorrectionTables', 'DEFAULT_TABLES',
           'UncertaintyBudget', 'UncertaintyComponent']
