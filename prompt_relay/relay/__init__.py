"""Stateless relay from canned text-processing tasks to an upstream LLM."""
