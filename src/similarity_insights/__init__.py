"""
Similarity Insights

Course-wide analytics, student intervention recommendations and worklist
triage computed from similarity report submissions.
"""

__version__ = "0.1.0"
