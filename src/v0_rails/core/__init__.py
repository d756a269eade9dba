"""
Core Package.

Contains the transformation pipeline:
- Component Extractor and IR Generator
- Markup Transformer (``core.markup``) over the typed JSX tree (``core.jsx``)
- Transformation Engine and Batch Runner
"""
