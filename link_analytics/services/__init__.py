"""
Redirect, click recording and analytics services.

Services receive their session or Database explicitly; none of them holds
module-level state.
"""
