"""Core domain: entry building, formatting and the logging facade."""
