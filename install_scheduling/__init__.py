"""
Install Scheduling Service.

Engineer recommendations, conflict detection and assignment changes for
installation jobs.
"""

__version__ = "0.1.0"
__description__ = "Install Scheduling Service"
