"""Core domain logic: chunking, classification, prompts, admin gate, exceptions."""
