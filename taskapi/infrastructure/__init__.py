"""Infrastructure: Firestore task store, token/password security, user directory."""
