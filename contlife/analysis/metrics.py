import numpy as np, pandas as pd
from scipy import ndimage

MOORE = np.ones((3, 3), dtype=int)


def cluster_count(grid) -> int:
    """Number of 8-connected groups of occupied cells, merging groups that touch across the wrapped edges."""
    labels, n = ndimage.label(grid.cells > 0, structure=MOORE)
    if n == 0:
        return 0
    parent = list(range(n + 1))

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(a, b):
        if a and b:
            ra, rb = find(a), find(b)
            if ra != rb:
                parent[ra] = rb

    w, h = labels.shape
    for y in range(h):
        for dy in (-1, 0, 1):
            union(labels[w - 1, y], labels[0, (y + dy) % h])
    for x in range(w):
        for dx in (-1, 0, 1):
            union(labels[x, h - 1], labels[(x + dx) % w, 0])
    return len({find(k) for k in range(1, n + 1)})


def metrics_from_log(log):
    df = pd.DataFrame(log)
    tte = float(next((t for t, e in zip(df['t'], df['extinct']) if e), np.nan))
    metrics = {
        'generations': int(df['t'].iloc[-1]),
        'extinct': bool(df['extinct'].any()),
        'time_to_extinction': tte,
        'initial_occupied': int(df['occupied'].iloc[0]),
        'peak_occupied': int(df['occupied'].max()),
        'final_occupied': int(df['occupied'].iloc[-1]),
        'final_mean_vitality': float(df['mean_vitality'].iloc[-1]),
        'occupancy_variance': float(np.var(df['occupied'])),
        'mean_clusters': float(df['clusters'].mean()),
        'vitality_min': float(df['min_value'].min()),
        'vitality_max': float(df['max_value'].max()),
    }
    return metrics, df
