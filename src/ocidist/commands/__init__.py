"""Built-in CLI sub-commands for ocidist."""
