"""database — in-memory user, session and task stores."""
