from sqlstudio.models.user import User
from sqlstudio.models.assignment import Assignment, Difficulty
from sqlstudio.models.attempt import Attempt

__all__ = ["User", "Assignment", "Difficulty", "Attempt"]
