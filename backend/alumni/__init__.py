"""KGHS Alumni Network API"""

__version__ = "1.0.0"
