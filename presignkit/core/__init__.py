"""Core building blocks: settings, client handles, diagnostics and errors."""
