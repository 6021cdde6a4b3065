"""StudyBolt API - AI study assistant backend."""

__version__ = "2.1.0"
