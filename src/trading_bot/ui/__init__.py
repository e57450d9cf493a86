"""Terminal output: result tables and error display."""
