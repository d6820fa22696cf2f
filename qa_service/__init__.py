# qa_service/__init__.py

"""Q&A web service: questions, answers, votes and accepted answers."""

__version__ = "0.1.0"
