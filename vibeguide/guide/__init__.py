"""Channel guide core: layout generation, grid index and navigation.

- layout: splits rows into blocks and builds the full layout
- grid_index: navigable index over non-blank cells and directional moves
- viewport: viewport protocol and scroll-into-view math
- navigator: focus handling, activation and re-anchoring
- featured: featured stream selection and rotation
- controller: owns guide data and rebuilds layout and index
"""
