"""Employee Portal package.

Feature modules (profiles, leaves, tasks, reports, attendance) each carry a
domain model, a repository protocol with its MySQL implementation, a service
holding the business rules and a thin Flask controller. ``dashboards`` composes
them into one role-specific page per signed-in user.
"""
