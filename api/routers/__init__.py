"""
API Routers - Organized endpoint handlers for the LifeLine API.

Each router handles a specific domain:
- chat: Emergency triage assistant sessions
- camps: Donation camp listing
- donors: Donor results view and availability alerts
"""
