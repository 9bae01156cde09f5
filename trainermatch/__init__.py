"""
TrainerMatch Platform
Trainer/vendor matchmaking: vendors post training requirements, trainers are
matched against them, matches move through proposals and sessions.

Architecture:
- PostgreSQL: Structured data (users, vendors, colleges, trainers, requirements,
  matches, proposals, sessions)
- MongoDB: Documents attached to colleges, trainers and requirements
- Redis/RQ: Notification jobs (email, SMS, WhatsApp) for the worker
"""

__version__ = "1.0.0"
