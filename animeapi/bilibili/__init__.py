"""Bilibili lookups, record types, cookie storage and request signing."""