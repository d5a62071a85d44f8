# Shared modules for cart and catalog services
