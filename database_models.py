from sqlalchemy import Column, Integer, String, Text, DateTime
from datetime import datetime
from database import Base


class User(Base):
    """Registered account. Email is unique and stored lowercased."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Project(Base):
    """
    Project submission from a student, written once with optional
    uploaded logo and PDF document paths.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    student_name = Column(String, nullable=True)
    project_title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    phone = Column(String, nullable=True)
    logo = Column(String, nullable=True)
    pdf_file = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_name": self.student_name,
            "project_title": self.project_title,
            "description": self.description,
            "phone": self.phone,
            "logo": self.logo,
            "pdf_file": self.pdf_file,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Design(Base):
    __tablename__ = "designs"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String, nullable=False, index=True)
    design_type = Column(String, nullable=False)
    design_data = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "design_type": self.design_type,
            "design_data": self.design_data,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
