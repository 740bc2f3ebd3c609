# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# the Base metadata knows every table when Alembic or init_db scans it.

from .base_class import Base

from .models.user_model import User, faculty_students
from .models.student_models import Student, WeeklyReport
from .models.group_model import Group
