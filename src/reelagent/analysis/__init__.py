"""Source analysis: segment features and agent response parsing."""
