"""Business logic for campaigns, content versions, moderation and feedback."""
