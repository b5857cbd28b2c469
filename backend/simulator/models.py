from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from .db import Base


class PromptSessionRecord(Base):
	__tablename__ = "prompt_sessions"
	id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
	title = Column(String(256), nullable=False)
	question = Column(Text, nullable=False)
	student_responses = Column(Text, nullable=False)  # JSON array of {id, content, quality?}
	analysis_question = Column(Text, nullable=True)
	analysis_result = Column(Text, nullable=True)
	submitted_by = Column(String(128), nullable=False, default="Anonymous")
	submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
