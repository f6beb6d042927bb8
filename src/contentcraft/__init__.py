"""ContentCraft AI — multi-agent campaign content generation."""
