"""Core DMC client logic.

Module Structure:
    - api/              : SOAP client, services and the DMC facade
    - attributes.py     : Attribute map <-> wire record codec
    - fault_report.py   : Fault reports for failed calls
    - info_report.py    : System information page
    - models.py         : Subscription modes, attribute types, link categories
    - validators.py     : Email syntax check
"""
