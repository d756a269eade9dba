"""
Markup Transformer: JSX markup to HTML with ERB directives.
"""
