"""
Front end: line classification and the condition language.
"""
