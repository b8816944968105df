"""Third-party identity provider integrations."""
