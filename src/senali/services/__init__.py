"""Application services: business rules on top of repositories and the LLM."""
