# clinic_scheduler/models/base.py
from sqlalchemy.orm import declarative_base

# Shared declarative base for every scheduling table
Base = declarative_base()
