"""
Top-level package for the finance table browser.

Most code should import from submodules such as:
    fin_browser.core    - schema, pipeline and the table engine
    fin_browser.tables  - receipts and expenditures tables
    fin_browser.ui      - the Dash front end
"""

__all__: list[str] = []
