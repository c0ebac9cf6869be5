# Core package initialization
# Submodules are imported directly (storefront.core.exceptions, ...);
# importing them here would create a cycle with storefront.domain.
