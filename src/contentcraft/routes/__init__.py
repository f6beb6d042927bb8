"""HTTP routes — thin JSON transport over the service layer."""
