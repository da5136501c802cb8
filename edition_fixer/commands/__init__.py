"""Click subcommands for edition-fixer (``check`` and ``fix``)."""
