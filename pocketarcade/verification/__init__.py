"""
Statistical checks of the games' random decisions.
"""

from pocketarcade.verification.fairness import AuditResult, FairnessAuditor

__all__ = ["AuditResult", "FairnessAuditor"]
