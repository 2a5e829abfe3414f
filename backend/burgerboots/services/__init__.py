# Services package init
"""
Burger Boots Backend — Services Layer
=======================================

What:  Business logic between routes (HTTP) and persistence.

Service Inventory:
    - MediaStore:          Image validation and atomic storage on disk
    - RecordStore:         Validated CRUD + ordered queries for one model
    - ListingQueryEngine:  Pagination and filter policies for listings
    - EntityLifecycle:     Shared create/read/update/delete orchestration
    - ProductService:      Products (lifecycle + listings)
    - BlogService:         Blog posts (lifecycle + listings + categories)

Services receive the request's AsyncSession as an argument and keep no
per-request state, so one instance of each serves all requests.
"""
