"""Clients and the client deletion policy"""
