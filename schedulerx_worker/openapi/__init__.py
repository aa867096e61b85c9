"""Management API client, request parameters and job configurations."""