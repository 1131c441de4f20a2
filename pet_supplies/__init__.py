"""
Pet supplies cleaning pipeline.

Cleans the pet-supplies product table column by column and rejoins the
results on product_id.
"""
