"""
lendmath — fixed-point финансовое ядро lending/leverage протокола.
"""

__version__ = "0.1.0"
