"""Client-side state containers"""
