"""Services and supplies catalog"""
