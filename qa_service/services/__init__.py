# qa_service/services/__init__.py

from . import answers, categories, items, questions, users

__all__ = ["answers", "categories", "items", "questions", "users"]
