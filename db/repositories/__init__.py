"""Repository layer for the CRM exercises.

Provides query, combined-write and dedup methods for the three entities:
- accounts: get_by_name, get_by_names, count_by_names, upsert, delete,
            find_or_create, insert_then_delete
- contacts: get_by_account, upsert, link_to_accounts
- opportunities: get_by_account, get_existing_names, create_missing
"""
