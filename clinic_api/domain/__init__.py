"""Business domains, one package per resource"""
