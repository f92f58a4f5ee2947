"""Concrete quality test calculations: core, pull-off and Schmidt hammer."""

__version__ = '1.0.0'
