"""
Working Time Act checker.

Checks recorded time entries against the average daily working time limit of
the German Arbeitszeitgesetz (§ 3 ArbZG).
"""

__version__ = "0.1.0"
