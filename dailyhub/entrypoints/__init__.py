"""Entrypoints - FastAPI アプリケーション"""
