"""
User accounts service.

The user accounts service is a Flask application that lets users create an
account, confirm their e-mail address with a one-time token, log in and out,
look up their own account, and delete it. It is the primary repository for
account records.

Context
-------
Account records (e-mail address, password hash, confirmation flag) are kept
in a relational database via SQLAlchemy. Confirmation tokens and
authenticated sessions are ephemeral, and are kept in Redis with an expiry.

When a user logs in, a session is registered in Redis and the user is issued
a signed session cookie. The cookie carries just enough information to find
and verify the session on subsequent requests.

The state of an account moves from *unconfirmed* to *confirmed* when the
token delivered to the user's e-mail address is redeemed, and to *deleted*
when the authenticated user deletes it. All of these transitions are
orchestrated by :class:`.lifecycle.AccountLifecycle`, which is given its
stores explicitly rather than reaching for global connections.
"""
