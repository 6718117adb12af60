"""
Controllers for the accounts application.

Controllers translate request data into calls on the
:class:`.lifecycle.AccountLifecycle`, and its outcomes into response data,
a status code and headers. They know nothing about Flask; cookies that
should be set on the response are returned under the ``cookies`` key of the
response data, as ``{name: (value, max_age)}``.
"""
