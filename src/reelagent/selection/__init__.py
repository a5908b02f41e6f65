"""Segment selection and scoring."""
