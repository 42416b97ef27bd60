"""Clinic scheduling API"""
