from distributor.merkle.hasher import *
from distributor.merkle.builder import *
from distributor.merkle.verify import *
from distributor.merkle.recipients import *
