"""
Post-login hooks that gate logins on Onfido identity verification.

An identity platform calls these hooks at two points of its login pipeline.
The first, on every login, decides whether the user still has to verify
their identity. If they do, the user is given an Onfido applicant (reused on
later logins) and sent to the hosted verification page with a short-lived
session token that binds the login to that applicant. The platform pauses
the login while the user is away.

When the user comes back, the second hook validates the session token and
marks the user as verified, so later logins skip the detour. Any failure
along the way denies that one login attempt; the user can start over.

The hooks do not act on the platform themselves. They are handed an event
(user record, request details, secrets) and an API object, and everything
they ask of the API is returned to the platform as a list of commands.
"""
