"""
Static analyses over parsed components: props, hooks, events, styles and slots.
"""
