"""
catalogsearch: course / program search over a graduate catalog PDF.
"""
