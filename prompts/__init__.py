"""
Prompt templates for extraction and the Pillora persona.
"""
