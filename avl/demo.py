"""
AVL Tree Demo -- Traversal dumps, rotation cases, height bounds, and rotation
statistics under a random insert/delete workload.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path

_root = str(Path(__file__).resolve().parents[1])
if _root not in sys.path:
    sys.path.insert(0, _root)

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from avl.avl_tree import AVLTree, Node, update_height
from avl.traversal import format_keys

SEED = 42

VIZ_DIR = Path(__file__).parent / "viz"

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

SAMPLE_KEYS = [5, 3, 8, 1, 4, 7, 9]
SAMPLE_DELETE = 3

ROTATION_CASES = [
    ("Left-Left", [30, 20, 10]),
    ("Right-Right", [10, 20, 30]),
    ("Left-Right", [30, 10, 20]),
    ("Right-Left", [10, 30, 20]),
]

HEIGHT_SWEEP_N = 2048
WORKLOAD_OPS = 5000
WORKLOAD_KEY_RANGE = 1000

logger = logging.getLogger(__name__)


class RotationCounter(logging.Handler):
    """Collects the rotation records emitted by ``avl.avl_tree``."""

    def __init__(self):
        super().__init__(logging.DEBUG)
        self.events = []
        self.counts = {"Left": 0, "Right": 0}

    def emit(self, record):
        message = record.getMessage()
        self.events.append(message)
        kind = message.split()[0]
        if kind in self.counts:
            self.counts[kind] += 1

    def reset(self):
        self.events = []
        self.counts = {"Left": 0, "Right": 0}


@contextmanager
def capture_rotations():
    tree_logger = logging.getLogger("avl.avl_tree")
    counter = RotationCounter()
    previous_level = tree_logger.level
    previous_propagate = tree_logger.propagate
    tree_logger.addHandler(counter)
    tree_logger.setLevel(logging.DEBUG)
    tree_logger.propagate = False
    try:
        yield counter
    finally:
        tree_logger.removeHandler(counter)
        tree_logger.setLevel(previous_level)
        tree_logger.propagate = previous_propagate


def _layout(root):
    """Map each node to (x, depth) with x taken from its in-order rank."""
    positions = {}
    edges = []

    def walk(node, depth):
        if node is None:
            return
        walk(node.left, depth + 1)
        positions[id(node)] = (len(positions), depth, node)
        walk(node.right, depth + 1)
        for child in (node.left, node.right):
            if child is not None:
                edges.append((id(node), id(child)))

    walk(root, 0)
    return positions, edges


def draw_tree(ax, root, title, color=COLORS["blue"]):
    positions, edges = _layout(root)
    for parent, child in edges:
        px, pd, _ = positions[parent]
        cx, cd, _ = positions[child]
        ax.plot([px, cx], [-pd, -cd], color=COLORS["dark"], linewidth=1.2, zorder=1)
    for x, depth, node in positions.values():
        ax.scatter([x], [-depth], s=700, color=color, edgecolor="white", zorder=2)
        ax.text(x, -depth, str(node.key), ha="center", va="center",
                fontsize=10, fontweight="bold", color="white", zorder=3)
        ax.text(x + 0.3, -depth + 0.25, f"h={node.height}", fontsize=7, color="gray")
    ax.set_title(title, fontsize=10, fontweight="bold")
    ax.set_xlim(-1, max(len(positions), 1))
    ax.set_ylim(-(max((d for _, d, _ in positions.values()), default=0) + 1), 1)
    ax.axis("off")


def _plain_insert(node, key):
    if node is None:
        return Node(key)
    if key < node.key:
        node.left = _plain_insert(node.left, key)
    elif key > node.key:
        node.right = _plain_insert(node.right, key)
    update_height(node)
    return node


def _plain_copy(node):
    if node is None:
        return None
    clone = Node(node.key)
    clone.height = node.height
    clone.left = _plain_copy(node.left)
    clone.right = _plain_copy(node.right)
    return clone


def _save(fig, name):
    path = VIZ_DIR / name
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


# ---------------------------------------------------------------------------
# Example 1: Build, delete, and dump every traversal
# ---------------------------------------------------------------------------
def example_1_sample_tree():
    """Build the sample tree, delete one key, and print all traversals."""
    print("=" * 60)
    print("Example 1: Sample Tree Traversals")
    print("=" * 60)

    tree = AVLTree()
    with capture_rotations() as counter:
        for key in SAMPLE_KEYS:
            tree.insert(key)
        built = _plain_copy(tree.root)
        tree.delete(SAMPLE_DELETE)

    for event in counter.events:
        print(f"  {event}")
    tree.check_invariants()

    print(f"\n  Inserted: {SAMPLE_KEYS}, deleted: {SAMPLE_DELETE}")
    print(f"  BFT:       {format_keys(tree.breadth_first(), '->')}")
    print(f"  Inorder:   {format_keys(tree.in_order())}")
    print(f"  Preorder:  {format_keys(tree.pre_order())}")
    print(f"  Postorder: {format_keys(tree.post_order())}")
    print(f"  Height: {tree.height()}, root balance factor: {tree.balance_factor()}")

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    draw_tree(axes[0], built, f"After inserting {SAMPLE_KEYS}")
    draw_tree(axes[1], tree.root, f"After deleting {SAMPLE_DELETE}", color=COLORS["green"])
    return _save(fig, "01_sample_tree.png")


# ---------------------------------------------------------------------------
# Example 2: The four insertion rotation cases
# ---------------------------------------------------------------------------
def example_2_rotation_cases():
    """Show each imbalance shape as a plain BST and after AVL rebalancing."""
    print("\n" + "=" * 60)
    print("Example 2: Rotation Cases")
    print("=" * 60)

    fig, axes = plt.subplots(2, len(ROTATION_CASES), figsize=(16, 8))
    for col, (name, keys) in enumerate(ROTATION_CASES):
        plain = None
        for key in keys:
            plain = _plain_insert(plain, key)

        tree = AVLTree()
        with capture_rotations() as counter:
            for key in keys:
                tree.insert(key)
        tree.check_invariants()

        print(f"\n  {name} {keys}: {', '.join(counter.events)}")
        print(f"    BFT after: {format_keys(tree.breadth_first(), '->')}")

        draw_tree(axes[0, col], plain, f"{name}: unbalanced", color=COLORS["red"])
        draw_tree(axes[1, col], tree.root, f"{name}: rebalanced", color=COLORS["green"])
    return _save(fig, "02_rotation_cases.png")


# ---------------------------------------------------------------------------
# Example 3: Height stays logarithmic
# ---------------------------------------------------------------------------
def example_3_height_bounds():
    """Track tree height while inserting ascending and shuffled keys."""
    print("\n" + "=" * 60)
    print("Example 3: Height vs. Size")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    sizes = np.arange(1, HEIGHT_SWEEP_N + 1)
    orders = {
        "Ascending": np.arange(HEIGHT_SWEEP_N),
        "Shuffled": rng.permutation(HEIGHT_SWEEP_N),
    }

    heights = {}
    for label, keys in orders.items():
        tree = AVLTree()
        trace = np.empty(HEIGHT_SWEEP_N, dtype=int)
        for i, key in enumerate(keys):
            tree.insert(int(key))
            trace[i] = tree.height()
        tree.check_invariants()
        heights[label] = trace
        print(f"  {label}: final height {trace[-1]} for n = {HEIGHT_SWEEP_N}")

    lower = np.ceil(np.log2(sizes + 1))
    upper = 1.4405 * np.log2(sizes + 2) - 0.3277
    print(f"  Bounds at n = {HEIGHT_SWEEP_N}: {lower[-1]:.0f} <= h <= {upper[-1]:.2f}")

    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(sizes, heights["Ascending"], color=COLORS["blue"], label="Ascending inserts")
    ax.plot(sizes, heights["Shuffled"], color=COLORS["orange"], label="Shuffled inserts")
    ax.plot(sizes, lower, "g--", label="Perfect tree: ceil(log2(n+1))")
    ax.plot(sizes, upper, "r--", label="AVL bound: 1.44 log2(n+2) - 0.33")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Number of keys (n)")
    ax.set_ylabel("Tree height")
    ax.set_title("AVL Height Stays Within the Logarithmic Bound", fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3)
    return _save(fig, "03_height_bounds.png")


# ---------------------------------------------------------------------------
# Example 4: Rotations under a mixed workload
# ---------------------------------------------------------------------------
def example_4_rotation_workload():
    """Count single rotations emitted by random inserts and deletes."""
    print("\n" + "=" * 60)
    print("Example 4: Rotation Statistics")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    ops = rng.random(WORKLOAD_OPS) < 0.6
    keys = rng.integers(0, WORKLOAD_KEY_RANGE, size=WORKLOAD_OPS)

    tree = AVLTree()
    per_phase = {"insert": {"Left": 0, "Right": 0}, "delete": {"Left": 0, "Right": 0}}
    sizes = np.empty(WORKLOAD_OPS, dtype=int)
    with capture_rotations() as counter:
        for i, (is_insert, key) in enumerate(zip(ops, keys)):
            counter.reset()
            phase = "insert" if is_insert else "delete"
            if is_insert:
                tree.insert(int(key))
            else:
                tree.delete(int(key))
            for kind, count in counter.counts.items():
                per_phase[phase][kind] += count
            sizes[i] = len(tree)
    tree.check_invariants()

    for phase, counts in per_phase.items():
        print(f"  {phase:>6}: {counts['Left']} left, {counts['Right']} right rotations")
    print(f"  Final size: {len(tree)}, height: {tree.height()}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    x = np.arange(2)
    for offset, kind, color in ((-0.15, "Left", COLORS["blue"]), (0.15, "Right", COLORS["purple"])):
        axes[0].bar(x + offset, [per_phase[p][kind] for p in ("insert", "delete")], 0.3,
                    label=f"{kind} rotations", color=color, edgecolor="white")
    axes[0].set_xticks(x)
    axes[0].set_xticklabels(["Insert", "Delete"])
    axes[0].set_ylabel("Rotations")
    axes[0].set_title("Rotations by Operation", fontweight="bold")
    axes[0].legend()
    axes[0].grid(True, alpha=0.3, axis="y")

    axes[1].plot(np.arange(WORKLOAD_OPS), sizes, color=COLORS["dark"])
    axes[1].set_xlabel("Operation")
    axes[1].set_ylabel("Keys in tree")
    axes[1].set_title("Tree Size During Workload", fontweight="bold")
    axes[1].grid(True, alpha=0.3)
    return _save(fig, "04_rotation_workload.png")


def generate_pdf_report(figures):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "AVL Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Height-Balanced Binary Search Tree", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        for title, path in figures:
            page = plt.figure(figsize=(11, 8.5))
            page.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            ax = page.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(plt.imread(path))
            ax.axis("off")
            pdf.savefig(page)
            plt.close(page)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    VIZ_DIR.mkdir(exist_ok=True)

    print("\n" + "#" * 60)
    print("#" + " " * 23 + "AVL TREE DEMO" + " " * 22 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    figures = [
        ("Example 1: Sample Tree", example_1_sample_tree()),
        ("Example 2: Rotation Cases", example_2_rotation_cases()),
        ("Example 3: Height Bounds", example_3_height_bounds()),
        ("Example 4: Rotation Workload", example_4_rotation_workload()),
    ]

    pdf_path = generate_pdf_report(figures)
    logger.info("wrote %d figures and %s", len(figures), pdf_path.name)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
