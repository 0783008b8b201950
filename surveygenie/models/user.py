"""User account model."""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from surveygenie.database import Base


class User(Base):
    """Survey author account.

    ``survey_count`` is a denormalized counter maintained by survey
    create/delete rather than derived by query.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    survey_count = Column(Integer, nullable=False, default=0, server_default="0")

    surveys = relationship("Survey", back_populates="owner", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, survey_count={self.survey_count})>"
