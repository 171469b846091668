# Text statistics application built on broker_kernel.
