"""Adapters layer - Firestore / Firebase Auth の実装"""
