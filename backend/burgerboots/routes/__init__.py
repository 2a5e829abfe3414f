# Routes package init
"""
Burger Boots Backend — API Routes Package
===========================================

Route Inventory:
    - products.py: GET/POST        /api/products
                   GET             /api/products/category/{category}
                   GET/PUT/DELETE  /api/products/{id}
    - blogs.py:    GET/POST        /api/blogs
                   GET             /api/blogs/categories
                   GET/PUT/DELETE  /api/blogs/{id}
    - media.py:    GET             /uploads/{path}
    - health.py:   GET             /health

Routes are thin: extract query/form data, call the service, return its model.
"""
