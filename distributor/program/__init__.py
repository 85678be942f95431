from distributor.program.addresses import *
from distributor.program.token import *
from distributor.program.distributor import *
