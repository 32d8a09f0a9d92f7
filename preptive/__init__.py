"""PrepTive exam-update search service."""
