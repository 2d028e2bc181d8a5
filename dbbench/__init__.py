# Gevent monkey patching must be done before any other imports
# Workers are greenlets, so a blocking database driver has to yield to the
# hub while it waits on I/O, otherwise one worker stalls the whole pool
from gevent import monkey

monkey.patch_all()
