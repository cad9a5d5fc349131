
import matplotlib.pyplot as plt
def plot_timeseries(df, path_prefix):
    paths = []
    for col, label in [('mean_vitality', 'mean vitality'), ('occupied', 'occupied cells'),
                       ('live', 'live cells (== 1)'), ('clusters', 'clusters')]:
        plt.figure(); plt.plot(df['t'], df[col]); plt.xlabel('generation'); plt.ylabel(label)
        path = f"{path_prefix}_{col}.png"
        plt.savefig(path, dpi=150, bbox_inches='tight'); plt.close()
        paths.append(path)
    return paths
