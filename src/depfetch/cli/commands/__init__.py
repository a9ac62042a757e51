"""Top-level depfetch commands (auto-discovered by the dispatcher)."""
