"""
funfact — generative "fun fact" text about waste categories.
"""
