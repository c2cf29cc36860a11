"""Timing of child processes, outlier statistics, parameter ranges, settings and result exports."""

__version__ = "1.19.0"