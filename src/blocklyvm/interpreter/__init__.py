"""
Action interpreter: dispatcher, scope & loop engine, expression evaluator and
function registry.
"""
