"""
Data sources: record types, the category/department taxonomy, random demo
generators and CSV loading.
"""
