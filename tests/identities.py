"""Ids of the ordinary test users; shaped like generated ids."""

USER_U_ID = "useru000000000000000000001"
USER_V_ID = "userv000000000000000000002"
