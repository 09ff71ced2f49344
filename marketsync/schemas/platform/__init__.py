from .shopify import ShopifyOrder, ShopifyProduct, ShopifyVariant
from .backmarket import BackMarketOrder
