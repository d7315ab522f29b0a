"""HTTP interface for the pets bounded context."""
