"""Request handling services for the /ask endpoint."""
