"""
FitTrack - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from fittrack.models.mongodb import UserDocument, WorkoutDocument

__all__ = [
    "UserDocument",
    "WorkoutDocument",
]
