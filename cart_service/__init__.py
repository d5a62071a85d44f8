"""Session cart service"""
