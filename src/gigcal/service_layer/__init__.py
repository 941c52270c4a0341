"""Service layer: commands, handlers, the message bus and read-side queries."""
