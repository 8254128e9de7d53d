# elb-probe - health, ping and diagnostic endpoints for load-balancer probing

__version__ = "1.0.0"
