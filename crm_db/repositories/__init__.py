"""Repository layer for the CRM record-store examples.

One example operation per function, grouped by record type:
- accounts: create_default_account, create_account, update_account,
            upsert_by_name, get_by_id, get_by_name
- contacts: create_for_account, update_last_name,
            link_to_accounts_by_last_name, get_by_id
- opportunities: update_stage, normalize, upsert_for_account,
                 get_by_id, get_by_account
- leads: insert_and_delete
- cases: insert_and_delete
"""
