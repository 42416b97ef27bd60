"""Cross-domain helpers: calendar dates, soft-delete, validators, response envelope"""
