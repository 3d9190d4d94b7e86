# ----------------- visualizer.py -----------------
import networkx as nx
import plotly.graph_objects as go


def draw_tour(graph, tour, pos=None, title=None, html_path=None, seed=0):
    """
    Visualizes a closed tour with Plotly.
    Towns are placed by `pos` (town -> (x, y)) or a spring layout of the
    distance graph; edges of the tour are drawn in order, wrap edge included.
    """
    n = graph.size()
    if pos is None:
        G = nx.Graph()
        G.add_nodes_from(range(n))
        for i in range(n):
            for j in range(i + 1, n):
                # closer towns pull harder
                G.add_edge(i, j, weight=2.0 / (graph.distance(i, j) + graph.distance(j, i)))
        pos = nx.spring_layout(G, weight="weight", seed=seed)

    # ---------- Tour edges ----------
    edge_x, edge_y = [], []
    for k in range(len(tour)):
        u, v = tour[k], tour[(k + 1) % len(tour)]
        x0, y0 = pos[u]
        x1, y1 = pos[v]
        edge_x += [x0, x1, None]
        edge_y += [y0, y1, None]

    tour_trace = go.Scatter(
        x=edge_x, y=edge_y,
        line=dict(width=2, color='blue'),
        mode="lines",
        hoverinfo="none",
        name="Best Tour",
    )

    # ---------- Towns ----------
    town_trace = go.Scatter(
        x=[pos[t][0] for t in range(n)],
        y=[pos[t][1] for t in range(n)],
        mode="markers+text",
        text=[str(t) for t in range(n)],
        textposition="top center",
        marker=dict(size=10, color='darkblue'),
        name="Towns",
    )

    # ---------- Start town ----------
    start_trace = go.Scatter(
        x=[pos[tour[0]][0]], y=[pos[tour[0]][1]],
        mode="markers",
        marker=dict(size=16, color='red', symbol='star'),
        name="Start/End",
    )

    length = graph.tour_length(tour)
    fig = go.Figure(data=[tour_trace, town_trace, start_trace])
    fig.update_layout(
        title=title or f"Best Tour - Length: {length:.2f}",
        showlegend=True,
        xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        plot_bgcolor='white',
    )
    if html_path:
        fig.write_html(html_path)
    return fig
