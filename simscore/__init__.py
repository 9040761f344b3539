"""
simscore - performance scoring core for simulated IT-support sessions.
"""

__version__ = "1.0.0"
