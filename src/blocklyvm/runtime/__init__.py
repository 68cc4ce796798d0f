"""
Runtime: interpreter context, variable store, program facade and session.
"""
