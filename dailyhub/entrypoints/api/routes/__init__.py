"""API ルート"""
