"""Application context and user-facing flows"""
