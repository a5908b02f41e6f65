"""Render plan construction and export through FFmpeg."""
