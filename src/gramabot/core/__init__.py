"""Domain logic: knowledge base, provider client and the /ask pipeline."""
