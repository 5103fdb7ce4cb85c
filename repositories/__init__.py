"""Supabase-backed repositories for the CRM mirror and webform configuration."""
