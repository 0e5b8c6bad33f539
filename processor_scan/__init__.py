"""
Data Processor Scan.

Reviews controller-to-processor contracts against UK GDPR Article 28(3)
and produces a downloadable remediation schedule.
"""

__version__ = "0.1.0"
