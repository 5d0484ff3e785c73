"""
Catalog Domain - shared reference data.

This domain handles data that projects reference but never own:
- Vendors (suppliers of selected materials)
- The furniture catalogue offered by the layout editor
"""
