"""Data access against the Supabase backend."""
