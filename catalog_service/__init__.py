"""Catalog validation service"""
