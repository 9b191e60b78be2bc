from .config import GraphViewConfig, load_config
from .controller import GraphViewController, NavigationRequest
from .drill import DrillNavigator
from .models import Dimension, DrillStep, Edge, Node, NodeKind
from .planner import ClusterPlanner, cluster_radius, get_next_dimension
from .simulation import ForceSimulation
from .viewport import InteractionController, Viewport

__all__ = [
    "ClusterPlanner",
    "Dimension",
    "DrillNavigator",
    "DrillStep",
    "Edge",
    "ForceSimulation",
    "GraphViewConfig",
    "GraphViewController",
    "InteractionController",
    "NavigationRequest",
    "Node",
    "NodeKind",
    "Viewport",
    "cluster_radius",
    "get_next_dimension",
    "load_config",
]
