"""
Tessellate Projects
SQLAlchemy models package.

Hierarchy:  Client → Project → Requirement → AuditTask → Issue
            Client → User,  Project ↔ User (project_users)
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
