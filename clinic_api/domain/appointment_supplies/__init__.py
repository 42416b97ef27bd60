"""Supplies used during appointments"""
