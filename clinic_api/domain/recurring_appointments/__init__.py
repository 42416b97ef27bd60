"""Recurring appointment templates"""
