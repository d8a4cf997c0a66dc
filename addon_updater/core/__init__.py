"""Installation engine, add-on database, catalog client and update orchestration."""
